import re
from pathlib import Path

from setuptools import setup

install_requires = [
    "multidict>=4.5,<7.0",
    "yarl>=1.9,<2.0",
]

extras_require = {
    "aiohttp": ["aiohttp>=3.9,<4.0"],
    "httpx": ["httpx>=0.24,<1.0"],
    "test": [
        "aiohttp>=3.9,<4.0",
        "httpx>=0.24,<1.0",
        "pytest>=7.0",
        "pytest-asyncio>=0.23",
    ],
}


def read(*parts):
    return Path(__file__).resolve().parent.joinpath(*parts).read_text().strip()


def read_version():
    regexp = re.compile(r"^__version__\W*=\W*\"([\d.abrc]+)\"")
    for line in read("typed_http", "__init__.py").splitlines():
        match = regexp.match(line)
        if match is not None:
            return match.group(1)
    else:
        raise RuntimeError("Cannot find version in typed_http/__init__.py")


with open("README.md", "r") as fh:
    long_description = fh.read()


setup(
    name="typed-http",
    version=read_version(),
    description="Typed requests, bodies, responses and results over a pluggable HTTP transport",
    long_description=long_description,
    long_description_content_type="text/markdown",
    platforms=["macOS", "POSIX", "Windows"],
    python_requires=">=3.11",
    project_urls={},
    license="MIT",
    packages=["typed_http"],
    package_dir={"typed_http": "./typed_http"},
    package_data={"typed_http": ["py.typed"]},
    install_requires=install_requires,
    extras_require=extras_require,
    include_package_data=True,
)
