from setuptools import setup
from fileserve import __version__


with open('README.md', 'rt') as fh:
    LONG_DESCRIPTION = fh.read()


setup(name='fileserve',
      version=__version__,
      description='serve a local directory tree over HTTP',
      long_description=LONG_DESCRIPTION,
      long_description_content_type='text/markdown',
      entry_points={
        'console_scripts': [
            'fileserve = fileserve.__main__:main'
        ]},
      license='MPL',
      python_requires='>=3.10',
      install_requires=[
          'pydantic>=2',
          'pyyaml',
          'rich',
          'typer',
      ],
      extras_require={
          'test': ['pytest', 'requests'],
      },
      packages=['fileserve', 'fileserve.cli'])
