# Filename convention: "Artist Name - Song Name.mp3"
SEPARATOR = "-"
DEFAULT_EXTENSIONS = (".mp3",)
