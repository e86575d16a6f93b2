import os, sys

from logger import DEBUG_ENV

def main():
    debug = bool(os.environ.get(DEBUG_ENV))
    if os.geteuid() != 0 and not debug:
        print("ERROR: The installer must be run as root.", file=sys.stderr)
        sys.exit(1)

    from system.disks import list_disks
    from validators import check_min_requirements
    disks = list_disks()
    ok, msg = check_min_requirements(disks)
    if not ok:
        print(f"ERROR: {msg}", file=sys.stderr)
        sys.exit(1)

    from app import InstallerWizard
    from system.eula import get_eula
    from system.interfaces import list_interfaces
    from system.locales import load_locales
    app = InstallerWizard(
        disks,
        load_locales(),
        interfaces=list_interfaces(),
        eula=get_eula(),
        interactive=not debug,
    )
    app.run()
    sys.exit(0 if app.installed else 1)

if __name__ == "__main__":
    main()
