import os
import pathlib
import sys

from setuptools import extension as setuptools_ext
from setuptools import setup
from setuptools.command import build_ext as setuptools_build_ext


_ROOT = pathlib.Path(__file__).parent


with open(str(_ROOT / "README.rst"), encoding="utf-8") as f:
    readme = f.read()


with open(str(_ROOT / "slrparsing" / "_version.py")) as f:
    for line in f:
        if line.startswith("__version__ ="):
            _, _, version = line.partition("=")
            VERSION = version.strip(" \n'\"")
            break
    else:
        raise RuntimeError(
            "unable to read the version from slrparsing/_version.py"
        )


USE_MYPYC = False
MYPY_DEPENDENCY = "mypy>=0.910"
setup_requires = []
ext_modules = []

if (
    os.environ.get("SLRPARSING_USE_MYPYC", None) in {"true", "1", "on"}
    or "--use-mypyc" in sys.argv
):
    if "--use-mypyc" in sys.argv:
        sys.argv.remove("--use-mypyc")
    setup_requires.append(MYPY_DEPENDENCY)
    # setuptools only runs build_ext when there is at least one extension;
    # mypycify replaces this placeholder.
    ext_modules.append(
        setuptools_ext.Extension(
            "slrparsing.placeholder", ["slrparsing/placeholder.c"]
        )
    )
    USE_MYPYC = True


class build_ext(setuptools_build_ext.build_ext):  # type: ignore
    def finalize_options(self) -> None:
        # finalize_options() may run more than once on the same command.
        if getattr(self, "_initialized", False):
            return

        if USE_MYPYC:
            try:
                from mypyc.build import mypycify
            except ImportError:
                raise RuntimeError(
                    "please install {} to compile slrparsing from "
                    "source".format(MYPY_DEPENDENCY)
                )

            self.distribution.ext_modules = mypycify(
                [
                    "slrparsing/firstfollow.py",
                    "slrparsing/automaton.py",
                    "slrparsing/table.py",
                ],
            )

        self._initialized = True
        super(build_ext, self).finalize_options()


setup(
    name="slrparsing",
    version=VERSION,
    python_requires=">=3.7.0",
    license="MIT",
    description="SLR(1) parser generator with a step-by-step shift-reduce "
    "simulator.",
    long_description=readme,
    long_description_content_type="text/x-rst",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Compilers",
        "Topic :: Text Processing :: General",
    ],
    packages=["slrparsing", "slrparsing.tests", "slrparsing.tests.grammars"],
    package_data={"slrparsing": ["py.typed"]},
    install_requires=["mypy_extensions>=0.4.3"],
    setup_requires=setup_requires,
    ext_modules=ext_modules,
    extras_require={
        "test": [
            "flake8",
            MYPY_DEPENDENCY,
        ]
    },
    cmdclass={"build_ext": build_ext},
)
