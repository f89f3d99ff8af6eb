import os

import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("requirements-dev.txt", "r") as fh:
    tests_require = [line for line in fh.read().split(os.linesep) if line]

with open("requirements.txt", "r") as fh:
    install_requires = [line for line in fh.read().split(os.linesep) if line]

setuptools.setup(
    name="edgerun-netmatrix",
    version="0.1.0.dev1",
    author="Thomas Rausch",
    author_email="t.rausch@dsg.tuwien.ac.at",
    description="netmatrix - Render network quality metrics between regions as a source x target matrix",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/edgerun/netmatrix",
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    package_data={'netmatrix': ['templates/*.html']},
    setup_requires=['wheel'],
    test_suite="tests",
    tests_require=tests_require,
    extras_require={'test': tests_require},
    install_requires=install_requires,
    python_requires='>=3.7',
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    entry_points={
        'console_scripts': [
            'netmatrix = netmatrix.cli.netmatrix:main',
        ],
    },

)
