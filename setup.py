from setuptools import setup, find_packages

setup(
    name='originctl',
    version='0.1.0',
    packages=find_packages(exclude=['originctl.tests', 'originctl.tests.*']),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'fastapi',
        'uvicorn',
        'kubernetes',
        'python-dotenv',
        'requests',
        'pyyaml',
        'jsonschema',
    ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
        ],
    },
    entry_points={
        'console_scripts': [
            'originctl=originctl.cli:run'
        ]
    },
    author='Your Name',
    description='Idempotent provisioning of an all-in-one OpenShift Origin VM',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: POSIX :: Linux',
    ],
    python_requires='>=3.8',
)
