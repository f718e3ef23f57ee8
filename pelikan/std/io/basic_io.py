import os


class BasicIO:
    """File operations behind the ``std_io`` natives.

    Failures are left as the underlying ``OSError``; the native registry
    wraps them in a NativeExecutionError.
    """
    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def read_file(self, filename: str) -> str:
        with open(filename, 'r', encoding=self.encoding) as f:
            return f.read()

    def write_file(self, filename: str, data: str) -> None:
        with open(filename, 'w', encoding=self.encoding) as f:
            f.write(data)

    def append_file(self, filename: str, data: str) -> None:
        with open(filename, 'a', encoding=self.encoding) as f:
            f.write(data)

    def file_exists(self, filename: str) -> bool:
        return os.path.exists(filename)

    def delete_file(self, filename: str) -> None:
        os.remove(filename)
