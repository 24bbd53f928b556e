from setuptools import setup, find_packages

setup(
    name="vodsplit",
    version="0.1.0",
    packages=find_packages(include=["vodsplit", "vodsplit.*"]),
    install_requires=[
        "ffmpeg-python",
        "rich>=13.0.0",  # Explicit minimum version
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "vodsplit=vodsplit.__main__:main",
        ],
    },
    python_requires=">=3.11",
)
