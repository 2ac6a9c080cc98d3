from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


ROOT = Path(__file__).resolve().parent


def read_text(path: Path, default: str = "") -> str:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError:
        return default


def read_requirements(filename: str) -> list[str]:
    req_path = ROOT / filename
    if not req_path.exists():
        return []
    lines = read_text(req_path).splitlines()
    out: list[str] = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or line.startswith("-r"):
            continue
        out.append(line)
    return out


version = read_text(ROOT / "syllabuscal" / "VERSION", default="0.1.0")

setup(
    name="syllabuscal",
    version=version,
    description="syllabuscal – turn course syllabi (text/PDF/Word) into calendar events (CLI + .ics + Google Calendar)",
    long_description=read_text(ROOT / "README.md"),
    long_description_content_type="text/markdown",
    author="syllabuscal contributors",
    keywords=["syllabus", "calendar", "ics", "google-calendar", "dateparser"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "Environment :: Console",
        "Topic :: Office/Business :: Scheduling",
    ],
    python_requires=">=3.9",
    packages=find_packages(exclude=("tests", ".github")),
    package_data={"syllabuscal": ["VERSION"]},
    install_requires=read_requirements("requirements.txt"),
    extras_require={"dev": read_requirements("requirements-dev.txt")},
    entry_points={"console_scripts": ["syllabuscal=syllabuscal.cli:main"]},
)
