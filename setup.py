from setuptools import setup, find_packages
setup(
    name="dmv_price_tracker",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    include_package_data=True,
    package_data={"dmv_price_tracker": ["templates/*.html"]},
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.100",
        "pydantic>=2",
        "jinja2>=3.0",
        "python-dotenv>=1.0",
        "requests>=2.28",
        "uvicorn>=0.23",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "httpx>=0.24",
            "jsonschema>=4",
        ],
    },
    entry_points={
        'console_scripts': [
            'dmv_price_tracker=dmv_price_tracker.__main__:_safe_main',
            'dmv-inspect-payload=dmv_price_tracker.tools.inspect_payload:main',
        ]
    }
)
