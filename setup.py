from setuptools import find_packages, setup
import io
import re


with io.open("README.md", encoding="utf-8") as f:
    long_description = f.read()

with io.open("requirements.txt", encoding="utf-8") as f:
    requirements = [r for r in f.read().split('\n') if len(r)]

# Don't import the package, its dependencies may not be installed yet.
with io.open("cryptoconditions/__init__.py", encoding="utf-8") as f:
    version = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)

setup(name="cryptoconditions-decoding",
      version=version,
      description="Decoding of Crypto-Conditions fulfillments and conditions",
      long_description=long_description,
      long_description_content_type="text/markdown",
      license="MIT",
      packages=find_packages(exclude=["tests"]),
      keywords=["crypto-conditions", "asn1", "der", "secp256k1", "fulfillment"],
      python_requires=">=3.7",
      install_requires=requirements,
      extras_require={"tests": ["pytest"]})
