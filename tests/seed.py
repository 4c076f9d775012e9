OWNER_A = "account-a"
OWNER_B = "account-b"

BUILDING_X = "bld-x"
BUILDING_Y = "bld-y"

UNIT_X1 = "unit-x1"
UNIT_X2 = "unit-x2"
UNIT_Y1 = "unit-y1"

COFFEE = "menu-coffee"
CAKE = "menu-cake"
MASSAGE = "svc-massage"
CLEANING = "svc-cleaning"
