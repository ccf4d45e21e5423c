from .photo_source import dump_groups, dump_photos, load_photos, parse_photos

__all__ = ["dump_groups", "dump_photos", "load_photos", "parse_photos"]
