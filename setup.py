# setup.py
from setuptools import setup, find_packages

setup(
    name='strapkit',
    version='0.1.0',
    description='Server-rendered Bootstrap 3 widgets with minimal client re-sync.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',

    # This automatically finds the `strapkit` and `strapkit_cli` packages
    packages=find_packages(include=['strapkit', 'strapkit.*', 'strapkit_cli', 'strapkit_cli.*']),

    # These are the dependencies the widgets and the CLI need to run.
    install_requires=[
        'PySide6',
        'typer[all]',
        'PyYAML',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },

    # It creates an executable script named `strapkit` that calls the `app`
    # object inside `strapkit_cli.main`.
    entry_points={
        'console_scripts': [
            'strapkit = strapkit_cli.main:app',
        ],
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: User Interfaces',
    ],
    python_requires='>=3.10',
)
