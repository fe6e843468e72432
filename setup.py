# setup.py
from setuptools import setup, find_packages

setup(
    name="rlisp",
    version="1.0.0",
    packages=find_packages(include=["rlisp", "rlisp.*", "rlisp_lsp", "rlisp_lsp.*"]),
    package_data={"rlisp": ["lib/*.rl"]},
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "rlisp=rlisp.__main__:main",
            "rlisp-ls=rlisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
