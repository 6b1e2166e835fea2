#!/usr/bin/env python
from setuptools import setup
setup(
    name='stackmob',
    version='1.0.0',
    description='a Python client for the StackMob platform',
    author='StackMob Python contributors',
    license='BSD',

    packages=['stackmob'],
    provides=['stackmob'],
    python_requires='>=3.8',
    install_requires=[
        'simplejson>=3.3.0',
        'httplib2>=0.18.0',
        'oauthlib>=3.0.0',
    ],
    extras_require={
        'test': ['pytest', 'mock'],
    },
)
