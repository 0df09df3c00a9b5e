from setuptools import setup


setup(
    name="bank-import",
    version="0.1.0",
    description="Typed parsing and column guessing for bank statement CSV exports of unknown dialect",
    packages=["bank_import"],
    python_requires=">=3.9",
    install_requires=[
        "pandas",
        "chardet",
    ],
    entry_points={
        "console_scripts": [
            "bank-import=bank_import.cli:main",
        ]
    },
)
