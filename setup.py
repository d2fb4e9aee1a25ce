import setuptools

setuptools.setup(
	name='metacode',
	version='0.1.0',
	packages=[
		'metacode',
		'metacode.handlebars',
		'metacode.macro',
		'metacode.support',
	],
	description='Expand Handlebars-style macros written in the comments of a source file',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Code Generators",
		"Development Status :: 3 - Alpha",
	],
)
