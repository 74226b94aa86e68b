"""
common_passwords.py -- Static set of widely reused passwords.

Entries are lower-case; callers compare against password.lower(). The list is
drawn from the top of public breach-frequency rankings and is intentionally
small -- the breach lookup covers the long tail.
"""

COMMON_PASSWORDS: frozenset[str] = frozenset(
    {
        "123456",
        "123456789",
        "12345678",
        "12345",
        "1234567",
        "1234567890",
        "1234",
        "123123",
        "111111",
        "000000",
        "654321",
        "666666",
        "121212",
        "112233",
        "123321",
        "7777777",
        "987654321",
        "password",
        "password1",
        "password123",
        "passw0rd",
        "p@ssw0rd",
        "qwerty",
        "qwerty123",
        "qwertyuiop",
        "1q2w3e4r",
        "1qaz2wsx",
        "zaq12wsx",
        "asdfghjkl",
        "asdf1234",
        "abc123",
        "abcd1234",
        "a1b2c3",
        "iloveyou",
        "admin",
        "admin123",
        "administrator",
        "root",
        "toor",
        "welcome",
        "welcome1",
        "welcome123",
        "letmein",
        "login",
        "monkey",
        "dragon",
        "master",
        "football",
        "baseball",
        "soccer",
        "hockey",
        "sunshine",
        "princess",
        "shadow",
        "superman",
        "batman",
        "trustno1",
        "starwars",
        "whatever",
        "freedom",
        "michael",
        "jennifer",
        "jordan",
        "hunter",
        "hunter2",
        "charlie",
        "buster",
        "ginger",
        "pepper",
        "cheese",
        "summer",
        "flower",
        "secret",
        "changeme",
        "default",
        "guest",
        "test",
        "test123",
        "testing",
        "computer",
        "internet",
        "access",
        "mustang",
        "killer",
        "pokemon",
        "lovely",
        "loveme",
        "babygirl",
        "ashley",
        "nicole",
        "daniel",
        "jessica",
        "matrix",
        "samsung",
        "google",
        "solo",
        "zxcvbnm",
        "zxcvbn",
        "qazwsx",
        "aa123456",
        "696969",
    }
)
