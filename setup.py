"""Generic setup.py for a pure Python package."""
import sys
from setuptools import setup

from synforest import __version__

with open('README.rst') as inp:
	README = inp.read()

REQUIRES = [
		'numpy',
		]
EXTRAS = dict(
		web=['flask'],
		test=['pytest', 'flask'],
		)
METADATA = dict(name='synforest',
		version=__version__,
		description='Build syntax trees and exchange them in bracket notation',
		long_description=README,
		long_description_content_type='text/x-rst',
		classifiers=[
				'Development Status :: 4 - Beta',
				'Environment :: Console',
				'Environment :: Web Environment',
				'Intended Audience :: Science/Research',
				'License :: OSI Approved :: GNU General Public License (GPL)',
				'Operating System :: POSIX',
				'Programming Language :: Python :: 3',
				'Topic :: Text Processing :: Linguistic',
		],
		install_requires=REQUIRES,
		extras_require=EXTRAS,
		python_requires='>=3.6',
		packages=['synforest'],
		entry_points={
			'console_scripts': ['synforest = synforest.cli:main']},
	)

if __name__ == '__main__':
	if sys.version_info[:2] < (3, 6):
		raise RuntimeError('Python version 3.6+ required.')
	setup(**METADATA)
