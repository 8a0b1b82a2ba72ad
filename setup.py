"""Set-up file for PorousFlow for installations using ``pip install .``"""
from setuptools import find_packages, setup


with open("requirements.txt") as f:
    required = f.read().splitlines()


setup(
    name="porousflow",
    version="0.3.0",
    license="GPL",
    keywords=["porous media energy balance finite elements jacobian"],
    install_requires=required,
    extras_require={"testing": ["pytest>=7"]},
    description="Lumped energy time derivative kernel for porous-media simulations",
    platforms=["Linux", "Windows", "Mac OS-X"],
    package_data={"porousflow": ["py.typed"]},
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    zip_safe=False,
)
