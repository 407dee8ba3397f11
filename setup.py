#!/usr/bin/env python3
"""
Setup script for lstackctl; package metadata lives in pyproject.toml.
"""

import sys

from setuptools import find_packages, setup

# Read the pyproject.toml to get the package metadata
try:
    import tomllib

    with open("pyproject.toml", "rb") as f:
        pyproject_data = tomllib.load(f)

    poetry = pyproject_data["tool"]["poetry"]
    name = poetry["name"]
    version = poetry["version"]
    description = poetry["description"]
    authors = poetry["authors"]
    license_text = poetry["license"]

    def _requirements(deps: dict) -> list[str]:
        out = []
        for dep, version_spec in deps.items():
            if dep == "python":
                continue
            if isinstance(version_spec, str):
                out.append(f"{dep}{version_spec}")
            elif isinstance(version_spec, dict) and "version" in version_spec:
                out.append(f"{dep}{version_spec['version']}")
            else:
                out.append(dep)
        return out

    # Get dependencies (optional ones are only installed through extras)
    dependencies = poetry["dependencies"]
    install_requires = _requirements(
        {
            k: v
            for k, v in dependencies.items()
            if not (isinstance(v, dict) and v.get("optional"))
        }
    )
    extras_require = {
        extra: _requirements({dep: dependencies[dep] for dep in deps})
        for extra, deps in poetry.get("extras", {}).items()
    }
    extras_require["test"] = _requirements(
        poetry.get("group", {}).get("test", {}).get("dependencies", {})
    )

    scripts = poetry.get("scripts", {})
    console_scripts = [f"{script}={target}" for script, target in scripts.items()]

    # Get packages
    packages = find_packages(where="src")
    package_dir = {"": "src"}

    setup(
        name=name,
        version=version,
        description=description,
        author=authors[0] if isinstance(authors, list) else authors,
        license=license_text,
        packages=packages,
        package_dir=package_dir,
        package_data={"lstackctl": ["resources/e2e/*"]},
        install_requires=install_requires,
        extras_require=extras_require,
        entry_points={"console_scripts": console_scripts},
        python_requires=">=3.11,<4.0",
        include_package_data=True,
        zip_safe=False,
    )

except Exception as e:
    print(f"Error reading pyproject.toml: {e}")
    sys.exit(1)
