#!/usr/bin/env python3

import os
import sys
from setuptools import setup, find_packages

def die(msg):
    print(msg, file=sys.stderr)
    sys.exit(1)

if sys.version_info < (3, 7):
    die("Need Python >= 3.7; found {}".format(sys.version))

with open(os.path.join(os.path.dirname(__file__), "requirements.txt")) as f:
    reqs = [line.strip() for line in f if line.strip()]

setup(
    name='sparsepoly',
    version='1.0.0',
    description='Sparse integer polynomials of one variable with parallel multiplication',
    packages=find_packages(exclude=["tests"]),
    install_requires=reqs,
    extras_require={ "test": ["pytest"] },
    python_requires=">=3.7",
    )
