"""User-facing error messages shared by services and endpoints."""


class AuthMessages:
    EMAIL_TAKEN = "Email already registered"
    USERNAME_TAKEN = "Username already taken"
    BAD_CREDENTIALS = "Incorrect email or password"
    INACTIVE_USER = "Inactive user"
    INVALID_TOKEN = "Could not validate credentials"
    USER_NOT_FOUND = "User not found"


class PetMessages:
    PET_NOT_FOUND = "Pet not found."
    INVENTORY_ITEM_NOT_FOUND = "Inventory item not found."
    CANNOT_USE_CUSTOMIZATION = "Customization items must be equipped, not used."
    CANNOT_EQUIP_CONSUMABLE = "Only customization items can be equipped."
    MISSING_SLOT = "This item has no equipment slot."
    OUT_OF_STOCK = "You have none of this item left."


class ShopMessages:
    ITEM_NOT_FOUND = "Item not found."
    NOT_ENOUGH_GOLD = "Not enough gold."
    INVALID_QUANTITY = "Quantity must be at least 1."


class TaskMessages:
    HABIT_NOT_FOUND = "Habit not found."
    DAILY_NOT_FOUND = "Daily not found."
    TODO_NOT_FOUND = "To-do not found."
    TODO_ALREADY_COMPLETED = "To-do already completed."
    REWARD_NOT_FOUND = "Reward not found."


class GroupMessages:
    GROUP_NOT_FOUND = "Group not found."
    GROUP_NAME_TAKEN = "A group with this name already exists."
    NOT_A_MEMBER = "You are not a member of this group."
    EMPTY_MESSAGE = "Message content is required."


class ChallengeMessages:
    CHALLENGE_NOT_FOUND = "Challenge not found."
