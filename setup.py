from setuptools import find_packages, setup

setup(
    name="ts-scaffold",
    version="0.1.0",
    description="Scaffold TypeScript packages, workspace members and monorepos with npm.",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={
        "ts_scaffold": [
            "templates/root/*",
            "templates/common/*",
            "templates/package/*",
            "templates/code/src/*",
            "templates/code/test/*",
        ]
    },
    entry_points={"console_scripts": ["ts-scaffold=ts_scaffold:main"]},
    extras_require={"test": ["pytest>=8", "approvaltests"]},
    python_requires=">=3.10",
)
