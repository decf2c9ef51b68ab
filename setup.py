import setuptools

setuptools.setup(
    name="sve_collection_tracker",
    version="0.2",
    description="Shadowverse Evolve collection tracker: checklist, set completion and deck building",
    packages=[
        "controllers",
        "models",
        "repositories",
        "services",
        "utils",
        "widgets",
        "widgets.dialogs",
        "widgets.handlers",
        "widgets.panels",
    ],
    py_modules=["main"],
    classifiers=["Programming Language :: Python :: 3", "Operating System :: OS Independent"],
    python_requires=">=3.11",
    install_requires=[
        "wxPython",  # Desktop UI (dataview, flatnotebook)
        "loguru",
        "pillow",  # Card image loading and scaling
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"gui_scripts": ["sve-collection-tracker=main:main"]},
)
