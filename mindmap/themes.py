"""Theme and palette definitions for the mind map application."""

# Colors that are not tied to a branch
ROOT_COLOR = '#333'
FALLBACK_COLOR = '#666'

# Default branch palette
NODE_COLORS = [
    '#FF6B6B', '#4ECDC4', '#45B7D1', '#96CEB4',
    '#FECA57', '#FF9FF3', '#54A0FF', '#5F27CD',
    '#00D2D3', '#FF9F43', '#EE5A24', '#0ABDE3'
]

# Named branch palettes selectable in settings
COLOR_SETS = {
    'vibrant': ['#FF6B6B', '#4ECDC4', '#FECA57', '#54A0FF', '#FF9FF3', '#96CEB4'],
    'gentle': ['#FFB5B5', '#A8E6CF', '#FFE699', '#B5D7FF', '#FFD4F0', '#C4E8C2'],
    'pastel': ['#FFD1DC', '#B4E7CE', '#FFF4C2', '#C2E0FF', '#E8D4FF', '#D4F1D4'],
    'nord': ['#BF616A', '#88C0D0', '#EBCB8B', '#5E81AC', '#B48EAD', '#A3BE8C'],
    'warm': ['#FF6B6B', '#FF9F43', '#FECA57', '#FFB142', '#FF7979', '#F8B739'],
    'cool': ['#5DADE2', '#48C9B0', '#85C1E2', '#52B788', '#6C9BD1', '#45B39D'],
    'monochrome': ['#4A4A4A', '#707070', '#909090', '#B0B0B0', '#D0D0D0', '#606060'],
    'sunset': ['#FF6B9D', '#FF8E53', '#FFB627', '#FFA45B', '#FF7B89', '#FFAA5C']
}

# Canvas themes
THEMES = {
    'default': {
        'background': '#FFFFFF',
        'text': '#000000'
    },
    'dark': {
        'background': '#2E3440',
        'text': '#D8DEE9'
    },
    'solarized': {
        'background': '#FDF6E3',
        'text': '#657B83'
    }
}
