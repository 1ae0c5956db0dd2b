"""
File type classification by name and extension.

Contents are never read. Besides the name, the only check made on disk is
for a source file next to a build output. Keep the tables below sorted.
"""
import os
from enum import Enum


class FileType(str, Enum):
    """Broad kinds of file, each with a theme role of the same name."""

    IMAGE = "image"
    VIDEO = "video"
    MUSIC = "music"
    LOSSLESS = "lossless"
    CRYPTO = "crypto"
    DOCUMENT = "document"
    COMPRESSED = "compressed"
    TEMP = "temp"
    COMPILED = "compiled"
    BUILD = "build"
    SOURCE = "source"


BUILD_FILENAMES = frozenset({
    'BUILD', 'BUILD.bazel', 'Brewfile', 'CMakeLists.txt', 'Cargo.toml',
    'Containerfile', 'Dockerfile', 'Earthfile', 'GNUmakefile', 'Gemfile',
    'Gruntfile.coffee', 'Gruntfile.js', 'Justfile', 'Makefile', 'PKGBUILD',
    'Pipfile', 'Podfile', 'Procfile', 'Rakefile', 'SConstruct', 'Vagrantfile',
    'WORKSPACE', 'build.gradle', 'build.sbt', 'build.xml', 'composer.json',
    'configure', 'flake.nix', 'jsconfig.json', 'justfile', 'makefile',
    'meson.build', 'mix.exs', 'package.json', 'pom.xml', 'pyproject.toml',
    'setup.cfg', 'tsconfig.json', 'webpack.config.js',
})

CRYPTO_FILENAMES = frozenset({
    'id_dsa', 'id_ecdsa', 'id_ecdsa_sk', 'id_ed25519', 'id_ed25519_sk', 'id_rsa',
})

EXTENSION_TYPES = {}

for _file_type, _extensions in (
    (FileType.IMAGE, (
        'arw', 'avif', 'bmp', 'cbr', 'cbz', 'cr2', 'dvi', 'eps', 'gif', 'heic',
        'heif', 'ico', 'j2c', 'j2k', 'jfif', 'jp2', 'jpeg', 'jpg', 'jxl', 'nef',
        'orf', 'pbm', 'pgm', 'png', 'pnm', 'ppm', 'ps', 'psd', 'raw', 'svg',
        'tif', 'tiff', 'webp', 'xcf', 'xpm',
    )),
    (FileType.VIDEO, (
        'avi', 'flv', 'h264', 'm2ts', 'm2v', 'm4v', 'mkv', 'mov', 'mp4', 'mpeg',
        'mpg', 'ogm', 'ogv', 'vob', 'webm', 'wmv',
    )),
    (FileType.MUSIC, ('aac', 'm4a', 'mka', 'mp2', 'mp3', 'ogg', 'opus', 'wma')),
    (FileType.LOSSLESS, ('aif', 'aifc', 'aiff', 'alac', 'ape', 'flac', 'pcm', 'wav', 'wv')),
    (FileType.CRYPTO, (
        'asc', 'gpg', 'kbx', 'md5', 'p12', 'pem', 'pfx', 'pgp', 'pub', 'sha1',
        'sha256', 'sha512', 'sig', 'signature',
    )),
    (FileType.DOCUMENT, (
        'djvu', 'doc', 'docx', 'eml', 'key', 'odp', 'ods', 'odt', 'pages', 'pdf',
        'ppt', 'pptx', 'rtf', 'xls', 'xlsm', 'xlsx',
    )),
    (FileType.COMPRESSED, (
        '7z', 'ar', 'arj', 'br', 'bz', 'bz2', 'bz3', 'cpio', 'deb', 'dmg', 'gz',
        'iso', 'lz', 'lz4', 'lzh', 'lzma', 'lzo', 'rar', 'rpm', 'tar', 'tbz',
        'tbz2', 'tgz', 'tlz', 'txz', 'xz', 'z', 'zip', 'zst',
    )),
    (FileType.TEMP, ('bak', 'bk', 'bkp', 'crdownload', 'part', 'swn', 'swo', 'swp', 'tmp')),
    (FileType.COMPILED, (
        'a', 'class', 'dll', 'dylib', 'elc', 'ko', 'lib', 'o', 'obj', 'pyc',
        'pyd', 'pyo', 'so', 'wasm', 'zwc',
    )),
    (FileType.BUILD, ('ninja',)),
    (FileType.SOURCE, (
        'awk', 'bash', 'c', 'c++', 'cc', 'clj', 'cpp', 'cs', 'css', 'cxx', 'd',
        'dart', 'el', 'elm', 'erl', 'ex', 'exs', 'fish', 'go', 'gradle',
        'groovy', 'h', 'hpp', 'hs', 'html', 'ipynb', 'java', 'jl', 'js', 'jsx',
        'kt', 'kts', 'less', 'lua', 'm', 'ml', 'nim', 'nix', 'php', 'pl', 'pm',
        'py', 'r', 'rb', 'rs', 'sass', 'scala', 'scss', 'sh', 'sql', 'swift',
        'tcl', 'ts', 'tsx', 'v', 'vim', 'vue', 'zig', 'zsh',
    )),
):
    for _ext in _extensions:
        EXTENSION_TYPES[_ext] = _file_type


# Extensions of build outputs and the source extensions they are built from.
COMPILED_SOURCES = {
    'class': ('java',),
    'elc': ('el',),
    'hi': ('hs',),
    'js': ('coffee', 'ts'),
    'o': ('c', 'cpp'),
    'pyc': ('py',),
}


def has_source_sibling(file):
    """Return True when a source file for *file* sits in the same directory."""
    sources = COMPILED_SOURCES.get(file.ext)
    if not sources or file.kind != 'file':
        return False
    directory, base = os.path.split(file.path)
    stem = base[:-len(file.ext) - 1]
    return any(os.path.exists(os.path.join(directory, f'{stem}.{ext}')) for ext in sources)


def get_file_type(file):
    """Return the FileType for *file*, or None when nothing matches."""
    name = file.name
    if name.lower().startswith('readme'):
        return FileType.BUILD
    if name in BUILD_FILENAMES:
        return FileType.BUILD
    if name in CRYPTO_FILENAMES:
        return FileType.CRYPTO
    if has_source_sibling(file):
        return FileType.COMPILED
    ext = file.ext
    if ext is not None and ext in EXTENSION_TYPES:
        return EXTENSION_TYPES[ext]
    if name.endswith('~') or (len(name) > 1 and name.startswith('#') and name.endswith('#')):
        return FileType.TEMP
    return None
