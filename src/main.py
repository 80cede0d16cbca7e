"""Main entry point for the school admin console.

This module provides an interactive command-line interface over the user
directory and the study material catalog. Every command reports success or
the error message and returns to the prompt; nothing is retried.
"""

import getpass
import logging
import sys
from typing import Callable, Dict, Optional

from config import API_BASE_URL, MATERIAL_TYPES, USER_ROLES
from core.dependencies import get_directory_manager, get_material_manager
from core.exceptions import SchoolAdminError
from core.logging_config import setup_logging
from schemas.resource import PickedFile, ResourceRecord
from schemas.user import UserRecord
from utils import resource_form, user_form
from utils.delivery_resolver import resolve_cover_image
from utils.directory_manager import DirectoryManager
from utils.material_manager import MaterialManager

logger = logging.getLogger(__name__)


def print_banner() -> None:
    """Print program banner and description."""
    print("=" * 70)
    print("  School Admin Console")
    print("=" * 70)
    print()
    print(f"Backend: {API_BASE_URL}")
    print()


def print_commands(has_materials: bool) -> None:
    """Print available commands."""
    print("\nUser management:")
    print("  users                  - show the directory")
    print("  expand <group>         - expand or collapse a class group")
    print("  add-user               - create a user")
    print("  edit-user <id>         - edit a user")
    print("  delete-user <id>       - delete a user")
    print("  reset-password <id>    - set a new temporary password")
    if has_materials:
        print("\nStudy materials:")
        print("  materials              - list my uploaded materials")
        print("  add-material           - upload a new material")
        print("  edit-material <id>     - edit a material")
        print("  delete-material <id>   - delete a material")
        print("  open <id> [file|link]  - open a material")
    print("\n  help                   - show this list")
    print("  q | quit               - exit")
    print()


def _ask(label: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    value = input(f"{label}{suffix}: ").strip()
    return value or default


def _confirm(question: str) -> bool:
    return input(f"{question} (y/N): ").strip().lower() in ("y", "yes")


# --- Users ---


def print_directory(directory: DirectoryManager) -> None:
    grouped = directory.grouped
    for key in grouped.keys():
        marker = "▼" if directory.expanded == key else "▶"
        print(f"{marker} {grouped.header(key)}")
        if directory.expanded != key:
            continue
        records = grouped.get(key)
        if not records:
            print("    No users in this section.")
        for user in records:
            print(f"    [{user.id}] {user.full_name}  (Username: {user.username})")
            if user.role == "teacher" and user.subjects_taught:
                print(f"        Subjects: {user.subjects_display()}")


def _find_user(directory: DirectoryManager, user_id: str) -> UserRecord:
    for user in directory.users:
        if str(user.id) == user_id:
            return user
    raise KeyError(f"No user with id {user_id}")


def edit_user(directory: DirectoryManager, user: Optional[UserRecord]) -> None:
    is_editing = user is not None
    form = directory.new_form(user)
    keys = directory.keys

    print("\n" + ("Edit User" if is_editing else "Add New User"))
    form = form.model_copy(
        update={
            "username": _ask("Username (Student ID / Teacher Email)", form.username),
            "full_name": _ask("Full Name", form.full_name),
        }
    )
    form = form.model_copy(
        update={
            "password": getpass.getpass(
                "New Password (leave blank to keep current): "
                if is_editing
                else "Password: "
            )
        }
    )
    role = _ask(f"Role ({'/'.join(USER_ROLES)})", form.role)
    if role not in USER_ROLES:
        print(f"Unknown role '{role}'.")
        return
    form = user_form.set_role(form, role, keys)

    if form.role == "teacher":
        text = _ask("Subjects Taught (comma-separated)", user_form.subjects_text(form))
        form = user_form.set_subjects_from_text(form, text)
    else:
        print("Class / Group: " + ", ".join(keys.student_keys))
        try:
            form = user_form.set_class_group(form, _ask("Class", form.class_group), keys)
        except ValueError as e:
            print(f"❌ {e}")
            return

    print("✅ " + directory.save(form, user))


def reset_password(directory: DirectoryManager, user: UserRecord) -> None:
    new_password = getpass.getpass(
        f'Enter a new temporary password for "{user.full_name}": '
    )
    print("✅ " + directory.reset_password(user, new_password))


# --- Materials ---


def print_material(catalog: MaterialManager, material: ResourceRecord) -> None:
    print(f"[{material.id}] {material.title}")
    print(f"    For: {material.class_group} | Subject: {material.subject}")
    print(f"    {material.description or 'No description provided.'}")
    cover = resolve_cover_image(material, catalog.api.base_url)
    if cover:
        print(f"    Cover: {cover}")
    for action in catalog.actions_for(material):
        print(f"    - {action.label}: {action.url}")


def _find_material(catalog: MaterialManager, material_id: str) -> ResourceRecord:
    for material in catalog.materials:
        if str(material.id) == material_id:
            return material
    raise KeyError(f"No material with id {material_id}")


def edit_material(catalog: MaterialManager, material: Optional[ResourceRecord]) -> None:
    form = catalog.new_form(material)
    classes = catalog.class_options()

    print("\n" + ("Edit Material" if material else "Add New Material"))
    if classes:
        print("Classes: " + ", ".join(classes))
    form = form.model_copy(
        update={
            "title": _ask("Title *", form.title),
            "description": _ask("Description", form.description),
            "subject": _ask("Subject", form.subject),
            "class_group": _ask("Class *", form.class_group),
            "material_type": _ask(
                f"Type ({', '.join(MATERIAL_TYPES)})", form.material_type
            ),
            "external_link": _ask("External Link (e.g., for Videos)", form.external_link),
        }
    )
    path = _ask(f"File path (current: {resource_form.file_label(form)})")
    if path:
        form = resource_form.attach_file(form, PickedFile.from_path(path))

    print("✅ " + catalog.save(form, material))


def open_material(catalog: MaterialManager, material: ResourceRecord, which: str) -> None:
    actions = catalog.actions_for(material)
    if not actions:
        print("This material has neither a file nor a link.")
        return
    if which:
        kind = "download" if which == "file" else "open_link"
        actions = [a for a in actions if a.kind == kind]
        if not actions:
            print(f"This material has no {which}.")
            return
    catalog.open(actions[0])


# --- Loop ---


def run_console(directory: DirectoryManager, catalog: Optional[MaterialManager]) -> None:
    """Interactive command loop."""
    print_banner()
    try:
        directory.refresh()
        if catalog is not None:
            catalog.refresh()
    except SchoolAdminError as e:
        print(f"❌ Network Error: {e}")
    print_commands(catalog is not None)

    user_commands: Dict[str, Callable[[str], None]] = {
        "users": lambda arg: print_directory(directory),
        "expand": lambda arg: (directory.toggle(arg), print_directory(directory)),
        "add-user": lambda arg: edit_user(directory, None),
        "edit-user": lambda arg: edit_user(directory, _find_user(directory, arg)),
        "delete-user": lambda arg: _delete_user(directory, _find_user(directory, arg)),
        "reset-password": lambda arg: reset_password(directory, _find_user(directory, arg)),
    }
    material_commands: Dict[str, Callable[[str], None]] = {}
    if catalog is not None:
        material_commands = {
            "materials": lambda arg: _print_materials(catalog),
            "add-material": lambda arg: edit_material(catalog, None),
            "edit-material": lambda arg: edit_material(catalog, _find_material(catalog, arg)),
            "delete-material": lambda arg: _delete_material(
                catalog, _find_material(catalog, arg)
            ),
            "open": lambda arg: _open(catalog, arg),
        }
    commands = {**user_commands, **material_commands}

    while True:
        line = input("> ").strip()
        if not line:
            continue
        command, _, arg = line.partition(" ")
        command = command.lower()
        arg = arg.strip()

        if command in ("q", "quit"):
            print("\nBye.")
            return
        if command == "help":
            print_commands(catalog is not None)
            continue
        handler = commands.get(command)
        if handler is None:
            print("❌ Invalid command, type 'help'.")
            continue
        try:
            handler(arg)
        except SchoolAdminError as e:
            print(f"❌ {e}")
        except KeyError as e:
            print(f"❌ {e.args[0]}")
        except OSError as e:
            print(f"❌ Cannot read file: {e}")


def _delete_user(directory: DirectoryManager, user: UserRecord) -> None:
    if _confirm(f'Are you sure you want to delete "{user.full_name}"?'):
        print("✅ " + directory.delete(user))


def _print_materials(catalog: MaterialManager) -> None:
    if not catalog.materials:
        print("You haven't uploaded any materials yet.")
    for material in catalog.materials:
        print_material(catalog, material)


def _delete_material(catalog: MaterialManager, material: ResourceRecord) -> None:
    if _confirm("Are you sure you want to delete this study material?"):
        print("✅ " + catalog.delete(material))


def _open(catalog: MaterialManager, arg: str) -> None:
    material_id, _, which = arg.partition(" ")
    open_material(catalog, _find_material(catalog, material_id), which.strip().lower())


def main() -> None:
    """Main entry point."""
    setup_logging()

    # Optional teacher id enables the study material commands
    teacher_id = sys.argv[1] if len(sys.argv) > 1 else None

    directory = get_directory_manager()
    catalog = get_material_manager(teacher_id) if teacher_id else None
    logger.info("Starting console (teacher id: %s)", teacher_id)
    try:
        run_console(directory, catalog)
    except (KeyboardInterrupt, EOFError):
        print("\n\nInterrupted.")


if __name__ == "__main__":
    main()
