from setuptools import setup

setup(
    name='osmrequest',
    version='0.1.0',
    author='Ian Dees',
    author_email='ian.dees@gmail.com',
    packages=['osmrequest'],
    license='LICENSE.txt',
    description='Reads and writes OpenStreetMap elements, notes, changesets and preferences through the OSM API.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    keywords = ['osm', 'openstreetmap', 'api', 'oauth'],
    python_requires='>=3.6',
    install_requires=[
        'lxml',
        'requests',
        'requests-oauthlib'
    ],
    extras_require={
        'test': ['pytest']
    }
)
