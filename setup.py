"""
Setup file for the Project Creation Wizard application.
"""

from setuptools import setup, find_packages

setup(
    name="project-creation-wizard",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "streamlit",
        "pandas",
        "numpy",
        "pydantic>=2",
        "fastapi",
        "uvicorn",
        "python-dotenv",
        "python-multipart",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    python_requires=">=3.9",
)
