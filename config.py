from dataclasses import dataclass

from bmp_parser import COLOR_STORE, ERROR_SYMBOL, BMPParser


@dataclass
class ViewerConfig:
    expected_extension: str = "bmp"
    log_path: str = "log.txt"
    color_table: tuple = COLOR_STORE
    fallback_symbol: str = ERROR_SYMBOL
    wait_for_enter: bool = True
    debug: bool = False

    @classmethod
    def from_args(cls, args):
        return cls(
            expected_extension=args.extension,
            log_path=args.log_file,
            wait_for_enter=not args.no_wait,
            debug=args.debug,
        )

    def make_parser(self, path):
        return BMPParser(
            path,
            expected_extension=self.expected_extension,
            color_table=self.color_table,
            fallback_symbol=self.fallback_symbol,
        )
