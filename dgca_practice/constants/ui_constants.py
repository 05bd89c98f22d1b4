"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "DGCA Practice Test"

SETUP_TITLE: str = "Practice Test"
SETUP_DESCRIPTION: str = "Configure your practice test and challenge yourself."
SETUP_START_BUTTON: str = "Start Test"
SETUP_RECOMMENDED_TEMPLATE: str = "Recommended: {minutes} minutes for {count} questions"

TEST_HEADER_TEMPLATE: str = "{label} Practice Test"
TEST_POSITION_TEMPLATE: str = "Question {position} of {total}"
TEST_ANSWERED_TEMPLATE: str = "{answered}/{total} answered"
TEST_PREV_BUTTON: str = "Previous"
TEST_NEXT_BUTTON: str = "Next"
TEST_FINISH_BUTTON: str = "Finish Test"
TEST_EXIT_BUTTON: str = "Exit Test"
TEST_NAVIGATOR_TITLE: str = "Question Navigator"
NAVIGATOR_COLUMNS: int = 10

RESULTS_TITLE: str = "Test Complete!"
RESULTS_EXITED_TITLE: str = "Test Exited"
RESULTS_RETRY_BUTTON: str = "Retry Test"

EXIT_CONFIRM_TITLE: str = "Exit Test"
EXIT_CONFIRM_MESSAGE: str = (
    "Are you sure you want to exit? Your answers so far will be scored "
    "and unanswered questions will count as incorrect."
)
TIME_UP_TITLE: str = "Time is up"
TIME_UP_MESSAGE: str = "The time limit has been reached. Your test has been submitted."
NO_QUESTIONS_MESSAGE: str = "No questions are available for the selected subject."

WELCOME_TITLE: str = "Welcome"
WELCOME_MESSAGE: str = (
    "Choose a subject, the number of questions and a time limit, then start the test. "
    "The test ends when you finish, exit or the clock runs out."
)
