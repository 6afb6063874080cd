import os
from setuptools import setup, find_packages

with open(os.path.join(os.path.dirname(__file__), 'requirements.txt')) as f:
    required = [line for line in f.read().splitlines() if line and not line.startswith('#')]

setup(
    name = 'jproxy',
    version = '0.1.0',
    url = 'https://github.com/fabric8-services/fabric8-jenkins-proxy',
    description = 'Layered configuration for the Jenkins proxy service',
    packages = find_packages(exclude=['test', 'test.*']),
    python_requires = '>=3.10',
    install_requires = required,
    extras_require = {
        'test': ['pytest>=7.0', 'pytest-cov>=4.0'],
    }
)
