import setuptools

long_description = "REST API storing sensor readings (datapoints) in MongoDB."

setuptools.setup(
    name="dpstore",
    version="0.1.0",
    description="Datapoint Store API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "event-count-logger>=1.1",
        "fastapi>=0.115.0",
        "pydantic~=2.0",
        "pymongo>=4.3.3",
        "pyyaml>=6.0",
        "uvicorn>=0.20",
    ],
    extras_require={
        "test": [
            "httpx",
            "mongomock>=4.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "dpstore=dpstore.bin.cli:run",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
    ],
    python_requires=">=3.9",
)
