import os

from setuptools import find_packages, setup

VERSION = '1.0.0'


def read_readme():
    """
    use the markdown readme as the long description when it is available
    """
    try:
        with open(os.path.join(os.path.dirname(__file__), 'README.md')) as fh:
            return fh.read()
    except OSError:
        return ''


TEST_REQS = [
    'timeout-decorator>=0.3.3',
    'coverage>=4.2',
    'pycodestyle>=2.3.1',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = []

DEPLOY_REQS = ['twine', 'wheel']


setup(
    name='svlink',
    version='{}'.format(VERSION),
    packages=find_packages(exclude=['tests', 'tests.*']),
    description='Clustering and deduplication of structural variant breakpoint evidence into target links',
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS + DEPLOY_REQS,
        'deploy': DEPLOY_REQS,
    },
    tests_require=TEST_REQS,
    python_requires='>=3.6',
)
