"""Setup script to install httpbinding as a package"""

from setuptools import find_namespace_packages, setup
from setuptools.command.develop import develop

from httpbinding import const

REQUIREMENTS = open("requirements.txt").read().splitlines()
REQUIREMENTS_DEV = open("requirements_dev.txt").read().splitlines()
MINIMUM_PYTHON_VERSION = ">=" + \
    ".".join(map(str, const.MINIMUM_PYTHON_VERSION))


class DevelopCommand(develop):
    """"Custom develop command that also install development requirements"""

    def __init__(self, dist, **kw):
        dist.install_requires.extend(REQUIREMENTS_DEV)
        super().__init__(dist)


setup(
    name="httpbinding",
    version=const.VERSION_STRING,
    description=("Parser and provider for the http binding configuration "
                 "of home automation items"),
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(
        include=("httpbinding", "httpbinding.*")),
    install_requires=REQUIREMENTS,
    extras_require={
        "test": REQUIREMENTS_DEV
    },
    cmdclass={
        "develop": DevelopCommand
    },
    python_requires=MINIMUM_PYTHON_VERSION,
    license="MIT",
    keywords="home automation http binding",
    entry_points={
        "console_scripts": [
            "httpbinding = httpbinding.__main__:main"
        ]
    }
)
