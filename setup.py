from setuptools import setup, find_packages

setup(
    name="core-calendar-mirror",
    version="1.0.0",
    description="Google Calendar event mirroring tool by CORE SYSTEMS",
    author="CORE SYSTEMS",
    packages=find_packages(include=["calendar_mirror", "calendar_mirror.*"]),
    python_requires=">=3.9",
    install_requires=[
        "google-api-python-client>=2.0",
        "google-auth>=2.0",
        "google-auth-oauthlib>=1.0",
        "requests>=2.25",
        "colorlog>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "core-calendar-mirror=calendar_mirror.main:main",
        ],
    },
)
