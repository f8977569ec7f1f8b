from setuptools import setup, find_packages

setup(
    name="eye-scroll-control",
    version="1.0.0",
    description="Hands-free scrolling, clicking and back navigation from gaze and blinks",
    author="Jarrod",
    packages=find_packages(where="python"),
    package_dir={"": "python"},
    python_requires=">=3.10",
    install_requires=[
        "pyautogui>=0.9.54",
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "pynput>=1.7.6",
    ],
)
