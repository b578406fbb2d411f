from setuptools import setup, find_packages
import os

# Read version from __init__.py
def get_version():
    init_path = os.path.join(os.path.dirname(__file__), 'depotview', '__init__.py')
    with open(init_path, 'r') as f:
        for line in f:
            if line.startswith('__version__'):
                return line.split('=')[1].strip().strip('"\'')
    return '0.1.0'

# Read README for long description
def get_long_description():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, "r", encoding="utf-8") as fh:
            return fh.read()
    return """
# DepotView - Portfolio CSV Import & Export

Import and export banks and stock/ETF/bond positions as CSV, with per-row
validation and a review step before anything is committed.

## Quick Start

```python
import depotview

result = depotview.parse_position_csv(csv_text, bank_id=1)
if not result.errors:
    depotview.commit_positions(store, result, 1, "append")
```
"""

setup(
    name='depotview',
    version=get_version(),
    description='Portfolio CSV import/export with row-level validation for banks and stock, ETF and bond positions',
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=['tests*', 'docs*', 'examples*']),
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Financial and Insurance Industry",
        "Topic :: Office/Business :: Financial",
        "Topic :: Office/Business :: Financial :: Investment",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        # Data processing
        'pandas>=1.3.0',

        # Web interface
        'streamlit>=1.46.0',

        # Configuration
        'python-dotenv>=0.19.0',
    ],
    extras_require={
        'test': [
            'pytest>=6.0.0',
            'pytest-cov>=2.12.0',
        ],
        'dev': [
            'pytest>=6.0.0',
            'pytest-cov>=2.12.0',
            'black>=21.0.0',
            'flake8>=3.9.0',
            'mypy>=0.910',
        ],
    },
    entry_points={
        'console_scripts': [
            'depotview=depotview.cli:main',
        ],
    },
    keywords=[
        'portfolio', 'csv', 'import', 'export', 'finance', 'depot',
        'isin', 'stocks', 'etf', 'bonds', 'validation'
    ],
    license='MIT',
    zip_safe=False,
)
