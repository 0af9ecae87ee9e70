from setuptools import setup
from pathlib import Path

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="lazypeon",
    version="0.1.0",
    description="Anti-idle agent: drifts the pointer and presses keys without fighting the user",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"lazypeon": "src"},
    packages=[
        "lazypeon",
        "lazypeon.backends",
        "lazypeon.keyboard",
        "lazypeon.pointer",
    ],
    install_requires=[
        "pyautogui",
        "pynput",
        "zendriver",
        "Pillow",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["lazypeon = lazypeon.cli:main"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
