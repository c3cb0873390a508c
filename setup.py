from pathlib import Path
from setuptools import find_packages, setup

HERE = Path(__file__).parent


def _read_version() -> str:
    init = HERE / "src" / "collectgen" / "__init__.py"
    for line in init.read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("'\"")
    raise RuntimeError("__version__ not found in src/collectgen/__init__.py")


setup(
    name="collectgen",
    version=_read_version(),
    description="Genera colecciones Postman a partir del código fuente con un LLM",
    author="GAHEOS",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "openai>=1.0",
        "tiktoken>=0.5",
    ],
    extras_require={
        "test": ["pytest>=7", "httpx>=0.23"],
    },
    entry_points={
        "console_scripts": ["collectgen=collectgen.cli:main"],
    },
)
