from setuptools import setup, find_packages

setup(
    name="fastboot-s3-deploy",
    version="0.1.0",
    packages=find_packages(),
    py_modules=["cli"],
    install_requires=[
        "boto3",
        "botocore",
    ],
    extras_require={
        "test": [
            "pytest",
            "moto[s3]>=5",
        ],
    },
    entry_points={
        'console_scripts': [
            'fastboot-s3=cli:main',
        ],
    },
    author="ecaa",
    description="Deploy plugin storing fastboot app-server builds in S3",
    python_requires='>=3.8',
)
