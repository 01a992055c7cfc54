from album_catalog.main import run

run()
