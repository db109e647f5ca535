#!/usr/bin/env python

from setuptools import setup

setup(
    name="zoho-crm",
    version="0.1.0",
    description="client for the zoho crm records API with transparent pagination",
    install_requires=[
        "requests>=2.22.0",
        "singer-python>=5.8.1",
        "python-dateutil>=2.8.0"
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points="""
          [console_scripts]
          zoho-crm=zoho_crm:main
      """,
    packages=["zoho_crm"],
)
