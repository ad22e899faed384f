"""Install the user accounts package."""

from setuptools import setup, find_packages

setup(
    name='useraccounts',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    install_requires=[
        "flask",
        "flask-sqlalchemy",
        "sqlalchemy",
        "pytz",
        "python-json-logger>=3.1",
    ],
    extras_require={
        'mysql': ["mysqlclient"],
        'test': ["pytest"],
    },
    zip_safe=False
)
