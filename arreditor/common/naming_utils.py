import re


def generate_untitled_name(existing_names, prefix="new-", extension=".arr"):
    """
    Generates the next free name for an untitled document.
    e.g. new-1.arr, then new-2.arr once new-1.arr is taken.
    """
    pattern = re.compile(r'^' + re.escape(prefix) + r'(\d+)' + re.escape(extension) + r'$')

    taken = set()
    for name in existing_names:
        match = pattern.match(name)
        if match:
            taken.add(int(match.group(1)))

    num = 1
    while num in taken:
        num += 1
    return f"{prefix}{num}{extension}"
