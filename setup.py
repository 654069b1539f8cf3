from setuptools import setup, find_packages
import re

# Read version from taxshield/__init__.py
with open('taxshield/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='tax-shield',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'taxshield': ['tax_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
        'requests>=2.28',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'tax-shield=taxshield.cli.__main__:main',
            'tax-shield-mcp=taxshield.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Safe Harbor quarterly estimated tax calculator.',
    python_requires='>=3.10',
)
