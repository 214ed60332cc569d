# setup.py
from setuptools import setup, find_packages

setup(
    name="pairpool",
    version="0.1.0",
    packages=find_packages(),
    python_requires=">=3.9",
    install_requires=[
        "msgpack",            # slot encoding
        "plyvel",             # LevelDB storage
        "prometheus_client",  # metrics
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "pairpool=pairpool.cli:main",
        ],
    },
)
