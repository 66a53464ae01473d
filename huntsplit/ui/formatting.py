def fmt_gold(n):
    """Gold values with '.' as thousands separator, as the game shows them."""
    try:
        return f"{int(n):,}".replace(",", ".")
    except (TypeError, ValueError):
        return str(n)
