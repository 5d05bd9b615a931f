"""
kvlink Setup Script

Install with: pip install -e .
"""

from setuptools import setup, find_packages

setup(
    name='kvlink',
    version='0.1.0',
    description='Association indexing on link-walking key/value stores',
    author='kvlink Team',
    packages=find_packages(include=['kvlink', 'kvlink.*']),
    install_requires=[
        'falkordb>=1.0.0',
        'redis>=5.0.0',
        'structlog>=23.1.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
            'pytest-asyncio>=0.21.0',
        ],
    },
    python_requires='>=3.11',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Database',
    ],
)
