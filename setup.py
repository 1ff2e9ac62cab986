"""Install the kub-demo services."""

from setuptools import setup, find_packages

setup(
    name='kubdemo',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        "flask",
        "werkzeug",
        "requests",
        "python-json-logger",
        "filelock",
        "click",
    ],
    extras_require={
        'test': [
            "pytest",
            "jsonschema",
            "urllib3",
        ],
    },
    entry_points={
        'console_scripts': ['kubdemo=kubdemo.cli:cli'],
    },
    zip_safe=False
)
