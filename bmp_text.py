import io


def write_grid(grid, sink):
    # One line per image row, then a blank line
    for row in grid:
        sink.write(row)
        sink.write("\n")
    sink.write("\n")


def write_info(headers, sink, name):
    sink.write(f"\n\n --------------- displayInfo: {name} --------------- \n\n\n")
    for section, values in headers.items():
        sink.write(f"{section}:\n")
        for key, value in values.items():
            sink.write(f"  {key}: {value}\n")
    sink.write("\n")


def format_grid(grid) -> str:
    buf = io.StringIO()
    write_grid(grid, buf)
    return buf.getvalue()


def format_info(headers, name) -> str:
    buf = io.StringIO()
    write_info(headers, buf, name)
    return buf.getvalue()
