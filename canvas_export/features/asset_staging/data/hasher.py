import hashlib
from ..domain.interfaces import IUrlHasher

class MD5UrlHasher(IUrlHasher):
    def digest(self, url: str) -> str:
        """
        Hashes the URL itself, not the content: the same reference always
        lands on the same file name, without a request.
        """
        return hashlib.md5(url.encode("utf-8")).hexdigest()
