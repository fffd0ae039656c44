from setuptools import setup, find_packages

package_name = 'netpbm_converter'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    install_requires=['setuptools', 'numpy', 'PyYAML'],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
    zip_safe=True,
    description='Codec and in-memory transforms for Netpbm bitmap (PBM) and greymap (PGM) images',
    license='MIT',
    entry_points={
        'console_scripts': [
            'netpbm_convert = netpbm_converter.converter:main',
        ],
    },
)
