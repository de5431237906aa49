"""Selection-index arithmetic shared by the main list and the options menu."""


def wrap_down(index, count):
    if count <= 0:
        return 0
    return 0 if index >= count - 1 else index + 1


def wrap_up(index, count):
    if count <= 0:
        return 0
    return count - 1 if index <= 0 else index - 1


def page_down(index, count, rows):
    if count <= 0:
        return 0
    return min(count - 1, index + max(1, rows))


def page_up(index, count, rows):
    if count <= 0:
        return 0
    return max(0, index - max(1, rows))


def next_lettered_index(labels, current, letter):
    """Index of the next label starting with ``letter``, searching cyclically.

    The search starts just after ``current`` and gives up when it gets back
    to it, returning ``current`` unchanged.
    """
    count = len(labels)
    letter = letter.lower()
    for step in range(1, count):
        index = (current + step) % count
        if labels[index][:1].lower() == letter:
            return index
    return current
