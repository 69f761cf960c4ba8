"""Running the assistant command-line tool and parsing its stream-json output."""