from clippie.config.paths import AppPaths, normalize_db_path

__all__ = ["AppPaths", "normalize_db_path"]
