"""
Password policy checks.

Complexity rules (length, letters, mixed case, numbers, symbols) plus a
lookup against the Have I Been Pwned range API. Only the first five hex
characters of the SHA-1 digest leave the process.
"""

import hashlib
import logging
import re

import requests

from library_admin.exceptions import PasswordCheckUnavailable

logger = logging.getLogger(__name__)

_LETTER = re.compile(r'[^\W\d_]', re.UNICODE)
_NUMBER = re.compile(r'\d')
_SYMBOL = re.compile(r'[\W_]', re.UNICODE)

DEFAULT_PWNED_URL = 'https://api.pwnedpasswords.com/range/'


class PasswordPolicy:
    def __init__(self, min_length=8, letters=True, mixed_case=True, numbers=True,
                 symbols=True, uncompromised=True, pwned_url=DEFAULT_PWNED_URL,
                 timeout=5, threshold=0):
        self.min_length = min_length
        self.letters = letters
        self.mixed_case = mixed_case
        self.numbers = numbers
        self.symbols = symbols
        self.uncompromised = uncompromised
        self.pwned_url = pwned_url
        self.timeout = timeout
        self.threshold = threshold

    @classmethod
    def from_config(cls, config):
        return cls(
            min_length=config.get('PASSWORD_MIN_LENGTH', 8),
            uncompromised=config.get('PASSWORD_UNCOMPROMISED_CHECK', True),
            pwned_url=config.get('PWNED_PASSWORDS_API_URL', DEFAULT_PWNED_URL),
            timeout=config.get('PWNED_PASSWORDS_TIMEOUT', 5),
        )

    def violations(self, password):
        """Return the list of rule messages the password fails (empty if it passes)."""
        password = password or ''
        messages = []

        if len(password) < self.min_length:
            messages.append(f'The password field must be at least {self.min_length} characters.')
        if self.letters and not _LETTER.search(password):
            messages.append('The password field must contain at least one letter.')
        if self.mixed_case and not (any(c.isupper() for c in password) and any(c.islower() for c in password)):
            messages.append('The password field must contain at least one uppercase and one lowercase letter.')
        if self.numbers and not _NUMBER.search(password):
            messages.append('The password field must contain at least one number.')
        if self.symbols and not _SYMBOL.search(password):
            messages.append('The password field must contain at least one symbol.')

        # Only spend a network round trip on otherwise valid passwords
        if not messages and self.uncompromised and self.is_compromised(password):
            messages.append(
                'The given password has appeared in a data leak. Please choose a different password.'
            )

        return messages

    def is_compromised(self, password):
        """
        True if the password appears in the breach corpus more than `threshold` times.

        If the service is unavailable the password is treated as not
        compromised and a warning is logged.
        """
        try:
            count = pwned_count(password, self.pwned_url, self.timeout)
        except PasswordCheckUnavailable as e:
            logger.warning(f"Skipping compromised-password check: {e}")
            return False
        return count > self.threshold


def pwned_count(password, url=DEFAULT_PWNED_URL, timeout=5):
    """Number of times the password appears in the Have I Been Pwned corpus."""
    digest = hashlib.sha1(password.encode('utf-8')).hexdigest().upper()
    prefix, suffix = digest[:5], digest[5:]

    try:
        response = requests.get(
            f'{url}{prefix}',
            headers={'Add-Padding': 'true'},
            timeout=timeout
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise PasswordCheckUnavailable(str(e)) from e

    for line in response.text.splitlines():
        candidate, _, count = line.partition(':')
        if candidate.strip().upper() == suffix:
            try:
                return int(count.strip())
            except ValueError:
                return 0
    return 0
