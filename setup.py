from setuptools import setup, find_packages

setup(
   name="odmreset",
   version="0.1",
   package_dir={"": "src"},
   packages=find_packages(where="src"),
   include_package_data=True,
   python_requires=">=3.8",
   install_requires=[
      "pymongo>=4.0",
      "pydantic>=2.0",
      "PyYAML>=6.0",
   ],
   extras_require={
      "test": ["pytest>=7.0", "mongomock>=4.1"],
   },
   entry_points={
      "pytest11": ["odmreset = odmreset.pytest_plugin"],
   },
)
