import codecs
import os
import re
import setuptools


here = os.path.abspath(os.path.dirname(__file__))


def read(*parts):
    with codecs.open(os.path.join(here, *parts), 'r') as fp:
        return fp.read()


def find_version(*file_paths):
    version_file = read(*file_paths)
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


setuptools.setup(
    name='routeboxer',
    version=find_version('src/routeboxer', '__init__.py'),
    author="Thomas Zamojski",
    author_email="thomas.zamojski@datastorm.fr",
    packages=['routeboxer'],
    package_dir={'routeboxer': 'src/routeboxer'},
    license='GPLv3',
    description="Rectangles covering the surroundings of a route.",
    long_description=read('README'),
    python_requires=">=3.6",
    install_requires=[
        "numpy >= 1.13",
        "shapely >= 1.6",
        "toolz >= 0.7.4",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
