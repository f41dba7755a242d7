"""Setup script for Checkmk Actions."""

from setuptools import setup, find_packages
import os

# Read the README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "Checkmk Actions - resource/operation actions over the Checkmk REST API"

setup(
    name='checkmk-actions',
    version='0.1.0',
    description='Workflow actions for the Checkmk REST API with ETag guarded mutations',
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    author='Checkmk Actions Team',
    author_email='dev@example.com',

    packages=find_packages(include=['checkmk_actions', 'checkmk_actions.*']),
    python_requires='>=3.8',
    install_requires=[
        'requests>=2.31.0',
        'pydantic>=2.5.0',
        'python-dotenv>=1.0.0',
        'PyYAML>=6.0',
    ],

    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
            'mypy>=1.5.0',
        ],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: System Administrators',
        'Topic :: System :: Systems Administration',
        'Topic :: System :: Monitoring',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    keywords='checkmk monitoring rest-api workflow automation etag',

    include_package_data=True,
    zip_safe=False,
)
