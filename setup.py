# setup.py
from setuptools import setup, find_packages

setup(
    name="pen_harvest",
    version="0.1.0",
    description="Archive CodePen pens as standalone pages with a browsable index",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"pen_harvest": ["templates/*.html"]},
    include_package_data=True,
    install_requires=[
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "hypothesis>=6.90",
        ],
    },
    entry_points={
        "console_scripts": [
            "pen-harvest=pen_harvest.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
