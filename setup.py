from setuptools import find_packages, setup

# Core dependencies
core_requires = [
    "numpy>=1.24.0",
    "opencv-python>=4.8.0",
    "mediapipe>=0.10.0",
    "rich>=13.0.0",
]

extras_dict = {
    # Development dependencies
    "dev": [
        "pytest>=7.0.0",
        "black>=22.0.0",
        "flake8>=4.0.0",
        "mypy>=0.950",
    ],
}

setup(
    name="handsfree2stage",
    version="1.0.0",
    description="Hand, pose and face landmarks as stage coordinates for block-based programming",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=core_requires,
    extras_require=extras_dict,
    entry_points={
        "console_scripts": [
            "handsfree2stage=handsfree2stage.cli:main",
        ],
    },
    python_requires=">=3.8",
)
