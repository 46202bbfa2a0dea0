from setuptools import find_packages, setup

setup(
  name = 'hxd',
  package_dir = {'': 'src'},
  packages = find_packages('src'),
  version = '1.0.0',
  license='GNU',
  description = 'command line hex dump of a file or a byte window of a file, with an optional ASCII panel',
  keywords = ['hexdump', 'xxd', 'binary', 'forensics'],
  python_requires='>=3.11',
  install_requires=[
"typer>=0.12",
"rich>=13.0",
"pydantic>=2.0",
"pydantic-settings>=2.0",
"PyYAML>=6.0",
      ],
  extras_require={
    'test': [
"pytest>=7.0",
    ],
  },
  entry_points={
    'console_scripts': [
      'hxd=hxd.cli.main:run_cli',
    ],
  },
  classifiers=[
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'Topic :: Utilities',
    'License :: OSI Approved :: GNU General Public License (GPL)',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
  ],
)
