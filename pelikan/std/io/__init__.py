from .basic_io import BasicIO
from pelikan.natives import NativeRegistry
from pelikan.types import to_string
from typing import List, Any

LIBRARY = 'std_io'


def populate_io_registry(registry: NativeRegistry) -> NativeRegistry:
        basic_io = BasicIO()

        def std_print(args: List[Any]) -> Any:
            print(''.join(to_string(a) for a in args))

        def std_read_file(args: List[Any]) -> Any:
            return basic_io.read_file(args[0])

        def std_write_file(args: List[Any]) -> Any:
            basic_io.write_file(args[0], args[1])

        def std_append_file(args: List[Any]) -> Any:
            basic_io.append_file(args[0], args[1])

        def std_file_exists(args: List[Any]) -> Any:
            return basic_io.file_exists(args[0])

        def std_delete_file(args: List[Any]) -> Any:
            basic_io.delete_file(args[0])

        registry.register(LIBRARY, 'print', None, ('any',), std_print)
        registry.register(LIBRARY, 'read_file', 1, ('str',), std_read_file)
        registry.register(LIBRARY, 'write_file', 2, ('str', 'str'), std_write_file)
        registry.register(LIBRARY, 'append_file', 2, ('str', 'str'), std_append_file)
        registry.register(LIBRARY, 'file_exists', 1, ('str',), std_file_exists)
        registry.register(LIBRARY, 'delete_file', 1, ('str',), std_delete_file)

        return registry
