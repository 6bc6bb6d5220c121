from setuptools import setup, find_packages

setup(
    name="circle-hough",
    version="1.0.0",
    description="Circle detection with a classical Hough transform",
    author="NovaVista",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    install_requires=[
        "opencv-python>=4.8.0",
        "numpy>=1.24.0",
        "scipy>=1.10.0",
        "scikit-image>=0.21.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "circlehough=circlehough.cli:main",
        ],
    },
    python_requires=">=3.9",
)
