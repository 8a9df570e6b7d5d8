import io

from setuptools import find_packages, setup
from os.path import dirname, abspath, join


with io.open("README.md", "rt", encoding="utf8") as f:
    readme = f.read()

base_path = dirname(abspath(__file__))

with open(join(base_path, "requirements.txt")) as req_file:
    requirements = [line.strip() for line in req_file if line.strip()]

setup(
    name="debscan",
    version="0.1.0",
    description="Build package index records from a directory of Debian binary packages",
    entry_points={"console_scripts": ["debscan=debscan.cli:main"]},
    long_description=readme,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    install_requires=requirements,
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
    zip_safe=False,
)
