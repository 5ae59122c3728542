"""Electrolysis Directory package.

This module is the root of the directory site generator, which turns a
zipped CSV dataset of businesses, cities, states and categories into a
static website with listing pages, XML sitemaps and JSON snapshots.

Package Structure
-----------------
- `pipeline/directory_data/`:
    Archive loading, city/state key resolution, count aggregation and
    slugged projections. Pure in-memory transforms after the load.
- `pipeline/website_generator/`:
    HTML page rendering, XML sitemaps, the filesystem sink and the runner
    that sequences every stage.
- `generate_site.py`: command-line entrypoint.
- `config.py`: All configuration constants (paths, member names, limits), as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> import src
>>> # See src/generate_site.py for the entrypoint.

"""
