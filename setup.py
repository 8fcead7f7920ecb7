from setuptools import setup

setup(
    name="tailscan",
    version="1.0.0",
    author="tailscan Team",
    description="tailscan - copy new bytes from a rotating log file for a bounded session",
    long_description=(
        "tailscan polls a single log file, forwards newly written bytes to "
        "result_<n>_<name> files next to it and detects log rotation without "
        "filesystem notifications."
    ),
    license="MIT",
    python_requires=">=3.8",
    package_dir={"tailscan": "src"},
    packages=["tailscan"],
    install_requires=[
        "requests",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "tailscan=tailscan.cli:main",
        ],
    },
)
