# setup.py
from setuptools import setup, find_packages

setup(
    name="transmatrix",
    version="1.0.0",
    description="Exporta e importa árboles de traducción en CSV, JSON, XML y XLSX",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={
        "transmatrix": ["interface/locales/*.json"],
    },
    python_requires=">=3.9",  # ET.indent
    install_requires=[
        "openpyxl",  # Codec XLSX
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'transmatrix=transmatrix.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
