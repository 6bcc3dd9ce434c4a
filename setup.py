import os

import setuptools

# Make sure that README.md decodes in environments that use the C locale
# (which implies ASCII), by explicitly giving the encoding.
with open(os.path.join(os.path.dirname(__file__), "README.md"), encoding="utf-8") as f:
    long_description = f.read()


setuptools.setup(
    name="kilo-lsh",
    # MAJOR.MINOR.PATCH, per http://semver.org
    version="0.0.1",
    description="A raw-mode terminal text viewer and a tiny command shell",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="kilo contributors",
    keywords="terminal, termios, raw mode, editor, shell",
    license="ISC",
    py_modules=(
        "rawterm",
        "kilo",
        "lsh",
    ),
    entry_points={
        "console_scripts": (
            "kilo = kilo:main",
            "lsh = lsh:main",
        )
    },
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.6",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Topic :: Terminals",
        "Topic :: System :: Shells",
        "License :: OSI Approved :: ISC License (ISCL)",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
    ],
)
