import unittest

from garment_erp.core.auth.permissions import (
    Permission,
    ROLE_PERMISSIONS,
    get_role_permissions,
    has_permission,
    has_any_permission,
)
from garment_erp.core.models.user import UserRole


class RolePermissionTableTestCase(unittest.TestCase):
    def test_every_role_has_an_entry(self):
        self.assertEqual(set(ROLE_PERMISSIONS), set(UserRole))

    def test_super_admin_holds_everything(self):
        self.assertEqual(get_role_permissions(UserRole.SUPER_ADMIN), frozenset(Permission))

    def test_admin_cannot_delete_users_or_manage_system(self):
        self.assertTrue(has_permission(UserRole.ADMIN, Permission.DELETE_TARGET))
        self.assertTrue(has_permission(UserRole.ADMIN, Permission.UPDATE_USER))
        self.assertFalse(has_permission(UserRole.ADMIN, Permission.DELETE_USER))
        self.assertFalse(has_permission(UserRole.ADMIN, Permission.MANAGE_SYSTEM))

    def test_manager_cannot_delete(self):
        granted = get_role_permissions(UserRole.MANAGER)
        self.assertFalse(any(p.value.startswith("DELETE_") for p in granted))
        self.assertIn(Permission.CREATE_REPORT, granted)

    def test_production_manager_scope(self):
        self.assertTrue(has_permission(UserRole.PRODUCTION_MANAGER, Permission.CREATE_TARGET))
        self.assertFalse(has_permission(UserRole.PRODUCTION_MANAGER, Permission.READ_CASHBOOK))

    def test_cashbook_manager_scope(self):
        self.assertTrue(has_permission(UserRole.CASHBOOK_MANAGER, Permission.CREATE_EXPENSE))
        self.assertFalse(has_permission(UserRole.CASHBOOK_MANAGER, Permission.READ_TARGET))

    def test_report_viewer_is_read_only(self):
        granted = get_role_permissions(UserRole.REPORT_VIEWER)
        self.assertTrue(granted)
        self.assertTrue(all(p.value.startswith("READ_") for p in granted))

    def test_plain_user(self):
        self.assertEqual(
            get_role_permissions(UserRole.USER),
            frozenset({Permission.READ_PRODUCTION, Permission.READ_REPORT}),
        )

    def test_any_permission(self):
        self.assertTrue(has_any_permission(UserRole.USER, [Permission.DELETE_USER, Permission.READ_REPORT]))
        self.assertFalse(has_any_permission(UserRole.USER, [Permission.DELETE_USER]))


if __name__ == "__main__":
    unittest.main()
