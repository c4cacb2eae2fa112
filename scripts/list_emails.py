from app.features.waitlist.dependencies.waitlist import get_waitlist_service


def list_emails():
    emails = get_waitlist_service().list_emails()
    for email in emails:
        print(email)
    print(f"Total emails: {len(emails)}")


if __name__ == "__main__":
    list_emails()
