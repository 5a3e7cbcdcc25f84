"""Install the AuthArmor Flask integration."""

from setuptools import setup, find_packages

setup(
    name='autharmor-flask',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    install_requires=[
        "flask",
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False
)
