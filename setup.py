"""Install the AuthZEN access-check package."""

from setuptools import setup, find_packages

setup(
    name='authzen-flask',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    install_requires=[
        "flask",
        "werkzeug",
        "requests",
        "pyjwt",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False
)
