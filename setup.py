"""Set-up file for equilpy for installations using ``pip install .``"""
from setuptools import find_packages, setup


with open("requirements.txt") as f:
    required = f.read().splitlines()


setup(
    name="equilpy",
    version="0.1.0",
    license="GPL",
    keywords=["phase equilibrium multicomponent multiphase thermodynamics"],
    install_requires=required,
    extras_require={"test": ["pytest"]},
    description="Residuals and exact Jacobians for generalized multiphase equilibrium",
    platforms=["Linux", "Windows", "Mac OS-X"],
    package_data={
        "equilpy": ["py.typed"],
    },
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    zip_safe=False,
)
