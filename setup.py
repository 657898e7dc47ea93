from setuptools import setup, find_namespace_packages
import re
from pathlib import Path

_version_re = re.compile(r"^__version__\s*(?::\s*\S+)?\s*=\s*['\"]([^'\"]+)['\"]", re.M)


def file_getVersion(rel_path: str) -> str:
    """
    Retrieve the version string from the specified file.
    """
    version_file = Path(rel_path)
    if not version_file.exists():
        raise RuntimeError(f"Version file {rel_path} not found.")

    match = _version_re.search(version_file.read_text())
    if not match:
        raise RuntimeError(f"Could not find __version__ in {rel_path}")
    return match.group(1)


setup(
    name='tfizz',
    version=file_getVersion('tfizz/tfizz.py'),
    description='Twisted FizzBuzz: ordered divisor/word token substitution for integers',
    license='MIT',
    packages=find_namespace_packages(include=['tfizz', 'tfizz.*']),
    python_requires='>=3.11',
    install_requires=[
        'click>=8.1',
        'httpx>=0.27',
        'loguru>=0.7',
        'pydantic>=2.5',
        'pydantic-settings>=2.1',
        'rich>=13.0',
    ],
    entry_points={
        'console_scripts': [
            'tfizz = tfizz.tfizz:main'
        ]
    },
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    extras_require={
        'none': [],
        'dev': [
            'pytest>=7.1',
            'pytest-asyncio>=0.23',
        ]
    }
)
