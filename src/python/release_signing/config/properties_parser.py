# Copyright 2015 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

import re
import string

from release_signing.base.exceptions import ConfigurationError


# Parsing as in java.util.Properties#load, which is what Gradle scripts use to read these files.
_LINE_BREAK = re.compile(r'\r\n|\r|\n')
_WHITESPACE = ' \t\f'
_COMMENT_CHARS = '#!'
_SEPARATORS = '=:'
_ESCAPES = {
  't': '\t',
  'n': '\n',
  'r': '\r',
  'f': '\f',
}


class PropertiesParseError(ConfigurationError):
  """Indicates text that is not a valid .properties file."""

  def __init__(self, message, line=None, key=None, path=None):
    super(PropertiesParseError, self).__init__(message, key=key, path=path)
    self.line = line


class PropertiesParser(object):
  """Parses the flat key-value text of a .properties file."""

  # Properties#load(InputStream) decodes as latin-1 and never fails on bytes.
  ENCODING = 'iso-8859-1'

  def parse_file(self, path):
    """Parse the .properties file at path.

    :raises: ``OSError`` if the file cannot be read, ``PropertiesParseError`` if it is malformed.
    """
    with open(path, 'r', encoding=self.ENCODING, newline='') as properties_file:
      content = properties_file.read()
    try:
      return self.parse(content)
    except PropertiesParseError as e:
      e.path = path
      raise

  def parse(self, content):
    """Parse content and return a dict of the properties in the order they were first seen.

    A key defined more than once keeps the last value.
    """
    properties = {}
    for line_number, line in self._logical_lines(content):
      raw_key, raw_value = self._split(line)
      try:
        key = self._unescape(raw_key, line_number)
      except PropertiesParseError as e:
        e.key = raw_key
        raise
      try:
        properties[key] = self._unescape(raw_value, line_number)
      except PropertiesParseError as e:
        e.key = key
        raise
    return properties

  def _logical_lines(self, content):
    """Yield (line_number, logical_line) pairs, joining continued lines and skipping comments."""
    pending = None
    start = None
    for line_number, natural_line in enumerate(_LINE_BREAK.split(content), 1):
      line = natural_line.lstrip(_WHITESPACE)
      if pending is None:
        # Comments only count at the start of a logical line.
        if not line or line[0] in _COMMENT_CHARS:
          continue
        pending = ''
        start = line_number
      if self._continues(line):
        pending += line[:-1]
      else:
        yield start, pending + line
        pending = None
    if pending is not None:
      yield start, pending

  @staticmethod
  def _continues(line):
    trailing = len(line) - len(line.rstrip('\\'))
    return trailing % 2 == 1

  @staticmethod
  def _split(line):
    index = 0
    escaped = False
    while index < len(line):
      char = line[index]
      if escaped:
        escaped = False
      elif char == '\\':
        escaped = True
      elif char in _SEPARATORS or char in _WHITESPACE:
        break
      index += 1

    key = line[:index]
    value = line[index:].lstrip(_WHITESPACE)
    if value and value[0] in _SEPARATORS:
      value = value[1:].lstrip(_WHITESPACE)
    return key, value

  @staticmethod
  def _unescape(text, line_number):
    if '\\' not in text:
      return text

    chars = []
    index = 0
    while index < len(text):
      char = text[index]
      index += 1
      if char != '\\':
        chars.append(char)
        continue
      if index == len(text):
        # A dangling backslash at the end of input is dropped.
        break
      escape = text[index]
      index += 1
      if escape == 'u':
        digits = text[index:index + 4]
        if len(digits) != 4 or any(digit not in string.hexdigits for digit in digits):
          raise PropertiesParseError('Malformed \\uxxxx encoding on line {0}.'.format(line_number),
                                     line=line_number)
        chars.append(chr(int(digits, 16)))
        index += 4
      else:
        chars.append(_ESCAPES.get(escape, escape))
    return ''.join(chars)
