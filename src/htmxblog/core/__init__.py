"""Post parsing, storage, view assembly and rendering."""
