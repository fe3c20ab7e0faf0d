from setuptools import setup, find_packages

setup(
    name="flavorfeast",
    version="0.1.0",
    packages=find_packages(include=["flavorfeast", "flavorfeast.*", "storefront", "storefront.*"]),
    include_package_data=True,
    install_requires=[
        "Django>=4.2",
        "djangorestframework>=3.14",
        "django-cors-headers>=4.0",
        "django-anymail>=10.0",
        "whitenoise>=6.5",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-django>=4.5",
        ],
    },
    author="Flavor Feast",
    description="REST API for the Flavor Feast food-ordering storefront (accounts, menu, orders, status emails).",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Framework :: Django",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: MIT License"
    ],
    python_requires='>=3.9',
)
