from setuptools import setup, find_packages
setup(
    name="hellofixture",
    version="0.1",
    description="Minimal sequential HTTP fixture server for integration tests",
    packages=find_packages(exclude=["test"]),
    python_requires=">=3.6",
    install_requires=[
        "Twisted>=19.7",
        "zope.interface",
    ],
    extras_require={
        "systemd": ["systemd-python"],
        "test": ["plumbum"],
    },
)
