from unittest.mock import MagicMock

from gwsclient.mail import GoogleMail

def test_profile_and_labels():
    service = MagicMock()
    users = service.users.return_value
    users.getProfile.return_value.execute.return_value = {'emailAddress': 'ryan@example.com',
                                                          'messagesTotal': 42}
    users.labels.return_value.list.return_value.execute.return_value = {
        'labels': [{'id': 'INBOX', 'name': 'INBOX'}, {'id': 'Label_1', 'name': 'Receipts'}]}
    mail = GoogleMail(service=service)
    assert(mail.get_profile()['emailAddress'] == "ryan@example.com")
    assert([l['name'] for l in mail.list_labels()] == ['INBOX', 'Receipts'])
    users.getProfile.assert_called_with(userId="me")
    assert(mail.test() == "Gmail: ryan@example.com (42 messages, 2 labels)")

def test_no_labels():
    service = MagicMock()
    service.users.return_value.labels.return_value.list.return_value.execute.return_value = {}
    assert(GoogleMail("someone@example.com", service=service).list_labels() == [])
    service.users.return_value.labels.return_value.list.assert_called_once_with(userId="someone@example.com")

def test_test_failure():
    service = MagicMock()
    service.users.return_value.getProfile.return_value.execute.side_effect = RuntimeError("denied")
    assert(GoogleMail(service=service).test() == "Gmail test failed: RuntimeError 0 denied")
