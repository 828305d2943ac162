from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="callorder",
    version="0.3.0",
    description="Exhaustive verification of asynchronous call-ordering contracts.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Testing",
    ],
    packages=find_packages(exclude=("tests", "tests.*", "examples")),
    package_data={"callorder.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=["pyyaml", "jsonschema"],
    extras_require={"dev": ["pytest", "hypothesis"]},
    entry_points={"console_scripts": ["callorder=callorder.cli:main"]},
)
