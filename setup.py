from setuptools import setup, find_packages
import re

# Read version from topearner/__init__.py
with open('topearner/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='top-earner',
    version=version,
    packages=find_packages(include=['topearner', 'topearner.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'requests>=2.28',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'top-earner=topearner.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Submit the prior-year top earner transactions of a category.',
    python_requires='>=3.10',
)
