from dataclasses import dataclass

@dataclass
class Theme:
    name: str
    local: str         # Address on the deployment's own network
    non_routable: str  # RFC1918 private range
    cache_hit: str     # Served from the cache
    remote: str        # Went to the geolocation API
    text: str
    text_dim: str
    error: str


THEMES = {
    "classic": Theme(
        name="classic",
        local="blue",
        non_routable="bright_magenta",
        cache_hit="green",
        remote="red",
        text="default",
        text_dim="grey50",
        error="bold red",
    ),
    "orange": Theme(
        name="orange",
        local="#5fafff",
        non_routable="#d787ff",
        cache_hit="#4ec94e",
        remote="#ff8c00",
        text="#d4d4d4",
        text_dim="#707070",
        error="#ff4444",
    ),
    "matrix": Theme(
        name="matrix",
        local="#00ea30",
        non_routable="#008a1c",
        cache_hit="#00ff41",
        remote="#b0f21d",
        text="#00ea30",
        text_dim="#008a1c",
        error="#ff2121",
    ),
    "monochrome": Theme(
        name="monochrome",
        local="#ffffff",
        non_routable="#777777",
        cache_hit="#cccccc",
        remote="#aaaaaa",
        text="#cccccc",
        text_dim="#555555",
        error="#ffffff",
    ),
}

def get_theme(name: str) -> Theme:
    """Returns the theme by name, defaults to 'classic' if not found."""
    return THEMES.get(name.lower(), THEMES["classic"])
