from gql_bridge.translator.classifier import classify_names, is_input_name


class TestClassifyNames:
    def test_partition_by_marker(self):
        inputs, outputs = classify_names(["User", "CreateUserDto", "Address", "updateuserdto"])
        assert inputs == ["CreateUserDto", "updateuserdto"]
        assert outputs == ["User", "Address"]

    def test_marker_is_case_insensitive(self):
        assert is_input_name("LoginDTO")
        assert is_input_name("dtoPayload")
        assert not is_input_name("User")

    def test_duplicates_collapse(self):
        inputs, outputs = classify_names(["User", "User", "AuthDto", "AuthDto"])
        assert inputs == ["AuthDto"]
        assert outputs == ["User"]

    def test_custom_marker(self):
        inputs, outputs = classify_names(["UserInput", "User"], marker="input")
        assert inputs == ["UserInput"]
        assert outputs == ["User"]

    def test_empty(self):
        assert classify_names([]) == ([], [])
