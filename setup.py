from setuptools import setup

requirements = [
    'numpy',
    'graphviz',
    'tqdm',
    'arsenal',
]


setup(
    name='parlex',
    version='0.1',
    description='Merge tables for lexing with a parallel scan',
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.10',
    scripts=[],
    packages=['parlex'],
)
