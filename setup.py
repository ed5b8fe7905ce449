# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="suitecheck",
    version="0.1.0",
    description="Verifica que todos los ficheros de datos de test estén cubiertos por la suite generada",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["suitecheck*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'suitecheck=suitecheck.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
