from setuptools import find_packages, setup

setup(
    name="notecalendar",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "rich",
        "colorama",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "notecalendar=notecalendar.cli:main",
        ],
    },
)
