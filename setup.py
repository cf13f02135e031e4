#!/usr/bin/env python3

from setuptools import setup, find_packages
import os

directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="cubespace",
        packages=find_packages(include=["cubespace", "cubespace.*"]),
        python_requires='>=3.9',
        version="0.1.0",
        license="MIT",
        description="Grid of cubes with drag-to-rotate controls",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["opengl", "quaternion", "visualization"],
        classifiers=[],
        include_package_data=True,
        install_requires=[
            "numpy",
            "PyOpenGL>=3.1",
            "glfw>=2.5.0",
        ],
        extras_require={
            "test": [
                "pytest",
                "scipy",
            ],
        },
        entry_points={
            "console_scripts": [
                "cubespace=cubespace.__main__:main",
            ],
        },
        zip_safe=False,
    )
