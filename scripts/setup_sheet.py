from app.features.waitlist.dependencies.waitlist import get_waitlist_service


def setup_sheet():
    service = get_waitlist_service()
    if service.setup_sheet():
        print("✅ Header row written to the waitlist sheet")
    else:
        print("Sheet already has a header row, nothing to do")


if __name__ == "__main__":
    setup_sheet()
