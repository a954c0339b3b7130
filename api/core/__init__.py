"""
Cross-cutting pieces every feature package leans on: the asyncpg `Database`,
environment `Settings`, logging setup, the 400 validation handler and the
`app.state` accessors. Table SQL lives in `content/`, media in `files/`.
"""
