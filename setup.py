from typing import Sequence

from setuptools import find_packages
from setuptools import setup


def get_requirements() -> Sequence[str]:
    with open("requirements.txt") as f:
        return [
            x.strip()
            for x in f.read().split("\n")
            if x.strip() and not x.startswith(("#", "--"))
        ]


setup(
    name="kube-switch",
    version="0.0.1",
    packages=find_packages(".", include=["libkubeswitch*", "kube_switch*"]),
    install_requires=get_requirements(),
    extras_require={"test": ["pytest"]},
    zip_safe=False,
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "kube-switch=kube_switch.cli:main",
        ],
    },
    python_requires=">=3.9",
)
