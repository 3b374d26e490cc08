from setuptools import setup, find_packages

package_name = 'client_gesture_predict'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'setuptools',
        'numpy>=1.24',
        'httpx>=0.24.0',
    ],
    extras_require={
        'test': [
            'pytest',
            'fastapi>=0.104.0',
        ],
    },
    zip_safe=True,
    maintainer='Hasan Çoban',
    maintainer_email='hasancoban@std.iyte.edu.tr',
    description='Hand landmark normalization and remote gesture prediction client',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'gesture-predict = client_gesture_predict.main:main',
        ],
    },
)
