from typing import Optional

from libcatalog.user import User


class Session:
    """The logged-in user for one run of the menu.

    Starts anonymous. There is no logout: once set, the user stays current
    until the process ends (a later successful login replaces it).
    """

    def __init__(self) -> None:
        self.current_user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def login(self, user: User) -> None:
        self.current_user = user
