import smtplib
import unittest
from unittest import mock

from gastracker.errors import NotifyError
from gastracker.models.prices import Category
from gastracker.notifiers.log import LogNotifier
from gastracker.notifiers.mail import EmailNotifier


def make_notifier():
    return EmailNotifier(
        from_addr="tracker@example.com",
        to_addr="me@example.com",
        password="secret",
    )


class TestEmailNotifier(unittest.TestCase):
    def test_message_content(self):
        msg = make_notifier().build_message(Category.LOW, Category.AVERAGE, 9)

        self.assertEqual(msg["Subject"], "Gas Prices are Low")
        self.assertEqual(msg["From"], "tracker@example.com")
        self.assertEqual(msg["To"], "me@example.com")
        body = msg.get_content()
        self.assertIn("Ethereum gas prices are no longer Average, they are now Low", body)
        self.assertIn("Specifically, medium gas is now 9", body)

    @mock.patch("gastracker.notifiers.mail.smtplib.SMTP")
    def test_send_uses_starttls_and_login(self, smtp_cls):
        smtp = smtp_cls.return_value.__enter__.return_value

        make_notifier().send(Category.HIGH, Category.AVERAGE, 80)

        smtp_cls.assert_called_once_with("smtp.gmail.com", 587, timeout=30.0)
        smtp.starttls.assert_called_once_with()
        smtp.login.assert_called_once_with("tracker@example.com", "secret")
        sent = smtp.send_message.call_args[0][0]
        self.assertEqual(sent["Subject"], "Gas Prices are High")

    @mock.patch("gastracker.notifiers.mail.smtplib.SMTP")
    def test_smtp_failure_is_notify_error(self, smtp_cls):
        smtp = smtp_cls.return_value.__enter__.return_value
        smtp.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")

        with self.assertRaises(NotifyError):
            make_notifier().send(Category.HIGH, Category.AVERAGE, 80)

    @mock.patch("gastracker.notifiers.mail.smtplib.SMTP")
    def test_connection_failure_is_notify_error(self, smtp_cls):
        smtp_cls.side_effect = ConnectionRefusedError("refused")

        with self.assertRaises(NotifyError):
            make_notifier().send(Category.LOW, Category.HIGH, 5)


class TestLogNotifier(unittest.TestCase):
    def test_logs_the_message(self):
        with self.assertLogs("gastracker.notify", level="WARNING") as logs:
            LogNotifier().send(Category.LOW, Category.HIGH, 5)
        self.assertIn("Gas Prices are Low", logs.output[0])
        self.assertIn("no longer High", logs.output[0])


if __name__ == "__main__":
    unittest.main()
