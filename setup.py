from setuptools import setup

setup(
    name = "ixdom",
    packages = ["ixdom"],
    version = "1.0.0",
    python_requires = ">=3.10",
    description = "Immutable namespace-aware XML object model",
    author = "The Ixdom Authors",
    install_requires = ["elementpath"],
    tests_require = ["pytest"],
    extras_require = {"test": ["pytest"]},
    keywords = ["xml", "namespaces", "immutable", "dom", "query"],
    classifiers = [
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Libraries",
        "Topic :: Text Processing :: Markup :: XML"],
    long_description = """\
.. |date| date::

****************
Welcome to Ixdom
****************

:Date: |date|

*Ixdom* is a Python 3 library providing an immutable, namespace-aware
XML object model. Elements carry their in-scope namespaces, can be
projected to scope-free minimal elements for XML equality, and can be
wrapped in an ancestry-aware view offering parent and ancestor axes.
A small algebra of element steps and predicates queries any of the
three element kinds.

Installation
============

::

    python -m pip install ixdom

Note that *Ixdom* requires Python 3.10 or higher.
"""
    )
