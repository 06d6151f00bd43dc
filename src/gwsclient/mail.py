"""
Gmail adapter.  Mostly a way to get an authenticated gmail v1 service, use
service() directly for anything not wrapped here.
"""
import logging

from .access import GoogleServiceClient
from .errors import describe_error

logger = logging.getLogger(__name__)

class GoogleMail(GoogleServiceClient):
    service_name = "gmail"
    service_version = "v1"
    scopes = ("gmail-ro",)

    def __init__(self, user_id: str = "me", service=None) -> None:
        super().__init__(service)
        self.user_id = user_id

    def get_profile(self) -> dict:
        """https://developers.google.com/gmail/api/reference/rest/v1/users/getProfile"""
        return self.service().users().getProfile(userId=self.user_id).execute()

    def list_labels(self) -> list[dict]:
        """https://developers.google.com/gmail/api/reference/rest/v1/users.labels/list"""
        response = self.service().users().labels().list(userId=self.user_id).execute()
        return response.get('labels', [])

    def test(self) -> str:
        try:
            profile = self.get_profile()
            labels = self.list_labels()
            return (f"Gmail: {profile.get('emailAddress', '')} "
                    f"({profile.get('messagesTotal', 0)} messages, {len(labels)} labels)")
        except Exception as e:
            logger.warning("gmail test failed: %s", describe_error(e))
            return f"Gmail test failed: {describe_error(e)}"
