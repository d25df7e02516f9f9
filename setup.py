from setuptools import find_packages, setup

setup(
    name="hookwork",
    version="0.1.0",
    description="Ordered, interceptable callback hooks with lazily compiled dispatch",
    packages=find_packages(include=["hookwork", "hookwork.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=["pydantic>=2.5", "PyYAML>=6.0"],
    extras_require={"test": ["pytest>=7.4"]},
)
