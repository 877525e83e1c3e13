"""Setup script for the Flockwave geodesy package."""

from setuptools import setup, find_namespace_packages

requires = []

__version__ = None
exec(open("src/flockwave/geodesy/version.py").read())

setup(
    name="flockwave-geodesy",
    version=__version__,
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["flockwave.*"]),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=requires,
    extras_require={"test": ["pytest"]},
)
