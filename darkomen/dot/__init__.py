from darkomen.dot.dot import Map, Path, Point, decode

__all__ = ["Map", "Path", "Point", "decode"]
