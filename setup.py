from setuptools import setup, find_namespace_packages


setup(
    name='fairlaunch_core',
    version='0.1',
    packages=find_namespace_packages(where="src", include=["fairlaunch_core*"]),
    package_dir={"": "src"},
    python_requires='>=3.8',
    install_requires=[
        'flask',
        'flask-openapi3',
        'pydantic>=2',
        'PyYAML',
        'structlog',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'fairlaunch_core = fairlaunch_core.main:main',
        ],
    },
)
